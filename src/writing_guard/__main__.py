import sys

from writing_guard.cli import main

sys.exit(main())
