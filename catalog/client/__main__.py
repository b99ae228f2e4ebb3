import sys

from catalog.client.cli import main

sys.exit(main())
