from pos_service.main import main

main()
