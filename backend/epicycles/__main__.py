import sys

from epicycles.cli import main

sys.exit(main())
