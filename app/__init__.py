"""Employee notification and salary progression service."""
