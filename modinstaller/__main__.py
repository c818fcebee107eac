from modinstaller.cli import main

main()
