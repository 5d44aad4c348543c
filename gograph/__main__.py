from gograph.cli import main

main()
