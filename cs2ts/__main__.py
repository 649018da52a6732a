from .cs2ts import main

raise SystemExit(main())
