"""HTTP-слой панели: роутеры FastAPI и middleware."""
