"""照看指南、完成记录与 AI 速查表数据模型。"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pet_sitter.ids import generate_id


class EmergencyContact(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    phone: str
    email: Optional[str] = None
    relationship: str = ""
    is_primary: bool = False
    notes: Optional[str] = None


class HomeInfo(BaseModel):
    address: Optional[str] = None
    wifi_name: Optional[str] = None
    wifi_password: Optional[str] = None
    alarm_code: Optional[str] = None
    door_code: Optional[str] = None
    garage_code: Optional[str] = None
    mailbox_code: Optional[str] = None
    spare_key_location: Optional[str] = None
    parking_info: Optional[str] = None
    trash_day: Optional[str] = None
    notes: Optional[str] = None


class FlightType(str, Enum):
    DEPARTURE = "departure"
    RETURN = "return"


class FlightInfo(BaseModel):
    id: str = Field(default_factory=generate_id)
    type: FlightType = FlightType.DEPARTURE
    airline: str = ""
    flight_number: str = ""
    departure_airport: str = ""
    arrival_airport: str = ""
    departure_time: str = ""
    arrival_time: str = ""

    model_config = ConfigDict(use_enum_values=True)


class HotelInfo(BaseModel):
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    confirmation_number: Optional[str] = None


class TravelItinerary(BaseModel):
    destination: Optional[str] = None
    departure_date: Optional[str] = None
    return_date: Optional[str] = None
    flights: List[FlightInfo] = Field(default_factory=list)
    hotel_info: Optional[HotelInfo] = None
    contact_while_away: Optional[str] = None
    timezone_difference: Optional[str] = None
    notes: Optional[str] = None


class HomeSystem(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    type: str = "other"  # hvac / water_heater / security / sprinkler / pool / fireplace / other
    location: Optional[str] = None
    instructions: Optional[str] = None
    emergency_shutoff: Optional[str] = None


class HomeTask(BaseModel):
    id: str = Field(default_factory=generate_id)
    title: str
    frequency: str = "daily"  # daily / weekly / as_needed
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    instructions: Optional[str] = None
    category: str = "other"


class Supply(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    location: str = ""
    quantity: Optional[str] = None
    notes: Optional[str] = None
    category: str = "other"


class Appliance(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    location: Optional[str] = None
    instructions: Optional[str] = None
    brand: Optional[str] = None
    notes: Optional[str] = None


class GuestAmenity(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str
    location: Optional[str] = None
    instructions: Optional[str] = None
    password: Optional[str] = None


class HomeCare(BaseModel):
    """房屋照看：随指南整体替换。"""
    systems: List[HomeSystem] = Field(default_factory=list)
    tasks: List[HomeTask] = Field(default_factory=list)
    supplies: List[Supply] = Field(default_factory=list)
    appliances: List[Appliance] = Field(default_factory=list)
    guest_amenities: List[GuestAmenity] = Field(default_factory=list)


class Guide(BaseModel):
    """照看指南。pet_ids 只是成员关系：删除宠物不影响指南，缺失的宠物展示为空。"""
    id: str = Field(..., description="指南唯一 ID")
    user_id: str = Field(..., description="所属用户 ID")
    title: str = Field(..., description="标题")
    pet_ids: List[str] = Field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    emergency_contacts: List[EmergencyContact] = Field(default_factory=list)
    home_info: HomeInfo = Field(default_factory=HomeInfo)
    travel_itinerary: Optional[TravelItinerary] = None
    home_care: Optional[HomeCare] = None
    additional_notes: Optional[str] = None
    created_at: str = Field(..., description="创建时间 ISO")
    updated_at: str = Field(..., description="更新时间 ISO")


class TaskCompletion(BaseModel):
    """某任务在某天的完成记录；(task_id, date) 唯一。"""
    id: str
    task_id: str
    guide_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    completed_at: Optional[str] = None
    completed_by: Optional[str] = None
    notes: Optional[str] = None


class CheatSheet(BaseModel):
    """AI 生成的速查表；每份指南最多保留一份。"""
    id: str
    guide_id: str
    content: str
    generated_at: str
    model_used: Optional[str] = None
