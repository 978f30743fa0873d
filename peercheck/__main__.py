from peercheck.terminal import main

main()
