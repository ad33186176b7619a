from thermosim.cli.main import main

main()
