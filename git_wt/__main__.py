"""Allow `python -m git_wt`."""

import sys

from git_wt.cli import main

sys.exit(main())
