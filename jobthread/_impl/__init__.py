"""Private implementation for jobthread. Import from ``jobthread`` instead."""
