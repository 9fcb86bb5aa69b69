"""Domain layer for the EAD exporter.

Record entities and the vocabulary and content rules of EAD 2002. Nothing
here knows how a document is written out.
"""
