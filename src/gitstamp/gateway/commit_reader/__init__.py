"""Commit reader gateway.

Reads the head commit's version label, author date and origin URL from a
repository's metadata directory.

Import from submodules:
- abc: CommitReader
- real: Pygit2CommitReader
- fake: FakeCommitReader
- types: CommitInfo, CommitReadError
"""
