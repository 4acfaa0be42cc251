from dashhcl.cli.main import main

main()
