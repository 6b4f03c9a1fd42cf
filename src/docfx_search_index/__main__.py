import sys

from docfx_search_index.cli import main

sys.exit(main())
