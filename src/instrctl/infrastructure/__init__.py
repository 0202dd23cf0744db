"""Infrastructure layer — file discovery, file I/O, and the Corpus.

This layer bridges the filesystem and the domain model.  It must never
import from services, commands, or output.
"""
