"""
Point pipeline: raw backend records to display-ready markers.

coordinates -> normalize -> images -> filters / grouping -> markers.
Every stage is a pure function producing a new collection.
"""
