"""
Garden knowledge graph: plant, soil, sun exposure and season matching.
"""
