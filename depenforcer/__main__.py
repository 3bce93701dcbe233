import sys

from depenforcer.main import main

sys.exit(main())
