import sys

from craftcalc.cli import main

sys.exit(main())
