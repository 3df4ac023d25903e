from user_registry.cli import main

raise SystemExit(main())
