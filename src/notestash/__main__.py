import sys
from notestash.cli import main

sys.exit(main())
