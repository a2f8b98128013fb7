import sys

from slack_message.cli import main

sys.exit(main())
