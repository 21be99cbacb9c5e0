import sys

from cdclsat.cli import main

sys.exit(main())
