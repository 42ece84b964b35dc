from taskresult.cli import main

main()
