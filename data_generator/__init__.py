# Sample sheet generation for drift checks and demos.
