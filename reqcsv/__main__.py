import sys

from reqcsv.cli import main

sys.exit(main())
