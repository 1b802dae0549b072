"""Бот барахолки: пошаговая подача объявления в канал."""
