from envsync.cli import main

raise SystemExit(main())
