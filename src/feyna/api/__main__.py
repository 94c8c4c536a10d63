from feyna.api.app import main

main()
