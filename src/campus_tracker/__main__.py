import sys

from campus_tracker.cli import main

sys.exit(main())
