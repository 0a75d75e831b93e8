"""Backend package - rendered C# declarations and files."""
