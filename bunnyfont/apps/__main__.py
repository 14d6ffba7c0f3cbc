import sys

from bunnyfont.apps.indexer import main

sys.exit(main())
