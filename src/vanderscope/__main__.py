from vanderscope.cli import main

main()
