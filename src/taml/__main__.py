import sys

from taml.cli import main

sys.exit(main())
