"""Core simulation model: topology, cells, rules and the evolution engine."""
