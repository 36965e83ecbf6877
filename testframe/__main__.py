import sys

from testframe.cli import main

sys.exit(main())
