"""Resolution services: the layered lookup chain and typed conversion."""
