from batterylog.cli import main

raise SystemExit(main())
