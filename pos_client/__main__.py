from pos_client.main import main

main()
