"""Domain services: EAD vocabulary tables and the mixed-content sanitizer."""
