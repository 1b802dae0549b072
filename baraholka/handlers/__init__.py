from aiogram import Router

from .listing import router as listing_router
from .start import router as start_router

router = Router()

# порядок важен: /start раньше общего обработчика сообщений
router.include_router(start_router)
router.include_router(listing_router)
