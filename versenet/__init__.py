"""
Verse Network Analytics

Graph analytics over the Bible cross-reference network:
- Degree centrality (most connected verses)
- Sampled betweenness centrality (bridge verses)
- Clustering coefficients and hub identification
- Label-propagation community detection

Usage:
    from versenet.adapters.outbound.persistence import JsonVerseRepository
    from versenet.application.services import StatisticsService

    graph = JsonVerseRepository("merged_bible_references.json").load_graph()
    report = StatisticsService(seed=42).compute(graph)
    print(report.to_json())
"""

__version__ = "1.0.0"
