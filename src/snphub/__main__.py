from snphub.cli import main

raise SystemExit(main())
