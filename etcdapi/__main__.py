import sys

from etcdapi.cli import main

sys.exit(main())
