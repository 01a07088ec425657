"""Allow ``python -m perimeter``."""
import sys

from perimeter.main import main

sys.exit(main())
