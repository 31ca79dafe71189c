"""Allow `python -m scripts` by running the seed script."""

import sys

from scripts.seed import main

sys.exit(main())
