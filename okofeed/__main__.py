import sys

from okofeed.cli import main

sys.exit(main())
