import sys

from gopher_indexer.cli import main

sys.exit(main(["python -m gopher_indexer"] + sys.argv[1:]))
