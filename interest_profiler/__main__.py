from interest_profiler.tools.profile_wallet import main

raise SystemExit(main())
