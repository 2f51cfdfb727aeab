"""Transaction services. Import submodules directly to avoid import cycles."""
