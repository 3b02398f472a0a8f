from ledger_gateway.main import main

main()
