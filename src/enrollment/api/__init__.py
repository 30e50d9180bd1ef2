"""HTTP surface of the Dugsi withdrawal core."""
