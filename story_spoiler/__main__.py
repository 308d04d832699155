from story_spoiler.main import main

raise SystemExit(main())
