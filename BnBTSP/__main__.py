from BnBTSP.cli import main

raise SystemExit(main())
