import sys

from ifcfg_manager.cli import main

sys.exit(main())
