from file_syncer.cli import main

main()
