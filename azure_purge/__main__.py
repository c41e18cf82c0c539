from azure_purge.main import main

main()
