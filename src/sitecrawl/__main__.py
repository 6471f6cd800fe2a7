from sitecrawl.cli import main

raise SystemExit(main())
