import sys

from ingest_orchestrator.cli import main

sys.exit(main())
