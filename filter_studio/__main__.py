import sys

from filter_studio.app import main

sys.exit(main())
