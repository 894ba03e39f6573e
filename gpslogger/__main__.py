import sys

from gpslogger.main import main

sys.exit(main())
