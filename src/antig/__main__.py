from antig.cli import main


raise SystemExit(main())
