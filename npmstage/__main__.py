from npmstage.cli.app import main

main()
