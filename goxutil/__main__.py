import sys

from goxutil.cli import main

sys.exit(main())
