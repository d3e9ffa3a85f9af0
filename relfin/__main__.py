from relfin.cli.app import main

main()
