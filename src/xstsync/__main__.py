from xstsync.cli import main

main()
