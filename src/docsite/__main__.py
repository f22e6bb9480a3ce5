from docsite.cli import main

raise SystemExit(main())
