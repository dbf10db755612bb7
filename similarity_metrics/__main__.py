from similarity_metrics.run import main

main()
