import sys

from pcdriver.cli import main

sys.exit(main())
