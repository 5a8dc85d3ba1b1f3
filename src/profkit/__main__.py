from profkit.main import main

main()
