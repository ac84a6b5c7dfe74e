import sys

from satenum.cli import main

sys.exit(main())
