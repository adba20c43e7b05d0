from detach.cli.app import main

main()
