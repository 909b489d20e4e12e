"""HTTP helpers shared by feature routers."""
