from dexwatch.main import main

main()
