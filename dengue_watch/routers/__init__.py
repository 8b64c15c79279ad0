# API routers package

from dengue_watch.routers.status import router as status_router
from dengue_watch.routers.training_data import router as training_data_router
from dengue_watch.routers.weather_summary import router as weather_summary_router

# Re-export for easy importing
status = status_router
training_data = training_data_router
weather_summary = weather_summary_router
