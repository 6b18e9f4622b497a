import sys

from note_junction.cli import main

sys.exit(main())
