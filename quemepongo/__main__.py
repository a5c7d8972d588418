import sys

from quemepongo.cli import main

sys.exit(main())
