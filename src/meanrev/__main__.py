from meanrev.main import main

main()
