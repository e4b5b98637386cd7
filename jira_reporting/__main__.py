import sys

from jira_reporting.cli import main

sys.exit(main())
