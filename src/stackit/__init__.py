"""StackIt: a Q&A forum backend."""
