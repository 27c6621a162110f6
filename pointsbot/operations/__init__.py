"""
Operations Layer

Pure status computations with no I/O and no shared state:
- level_resolver: points to level tier, next level and remaining points
- leaderboard_ranker: rank of a participant within a population snapshot
- status_assembler: level, rank and last-sync text combined into a StatusReport
"""
