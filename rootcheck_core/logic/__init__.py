"""
Domain logic: models, static detection data and the aggregation engine.
"""
