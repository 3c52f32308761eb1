import sys

from tactics_trainer.cli import main

sys.exit(main())
