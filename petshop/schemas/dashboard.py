from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_customers: int
    total_pets: int
    appointments_today: int
    completed_today: int = Field(default=0)
