"""Event routes, including the venue weather forecast."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from motorsports.auth import CurrentUser, require_reader, require_writer
from motorsports.database import get_db
from motorsports.models.event import Event
from motorsports.schemas.common import ApiResponse, update_fields
from motorsports.schemas.event import DATE_RANGE_ERROR, EventCreate, EventResponse, EventUpdate, as_utc
from motorsports.services.weather import WeatherService, get_weather_service

router = APIRouter(prefix="/events", tags=["Events"])


def get_event_or_404(db: Session, event_id: str, detail: str = "Event not found") -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )
    return event


@router.get("", response_model=ApiResponse[List[EventResponse]])
async def list_events(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """List all events by start date."""
    events = db.query(Event).order_by(Event.start_date.asc()).all()
    return ApiResponse(
        data=[EventResponse.model_validate(e) for e in events],
        count=len(events),
    )


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
async def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_reader)
):
    """Get a specific event."""
    event = get_event_or_404(db, event_id)
    return ApiResponse(data=EventResponse.model_validate(event))


@router.post("", response_model=ApiResponse[EventResponse], status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Create a new event."""
    event = Event(**event_data.model_dump(exclude_none=True))
    db.add(event)
    db.commit()
    db.refresh(event)
    return ApiResponse(
        data=EventResponse.model_validate(event),
        message="Event created successfully",
    )


@router.put("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(
    event_id: str,
    event_update: EventUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Update an event. The resulting date range must still be ordered."""
    event = get_event_or_404(db, event_id)

    update_data = update_fields(event_update, clearable=("description", "notes"))
    start = as_utc(update_data.get("start_date") or event.start_date)
    end = as_utc(update_data.get("end_date") or event.end_date)
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=DATE_RANGE_ERROR
        )

    for field, value in update_data.items():
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    return ApiResponse(
        data=EventResponse.model_validate(event),
        message="Event updated successfully",
    )


@router.delete("/{event_id}", response_model=ApiResponse[None])
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_writer)
):
    """Delete an event with its setup sheets, lap times and upload records."""
    event = get_event_or_404(db, event_id)
    db.delete(event)
    db.commit()
    return ApiResponse(message="Event deleted successfully")


@router.get("/{event_id}/weather", response_model=ApiResponse[dict])
async def get_event_weather(
    event_id: str,
    db: Session = Depends(get_db),
    weather: WeatherService = Depends(get_weather_service),
    current_user: CurrentUser = Depends(require_reader)
):
    """Forecast for the event venue over the event dates (Open-Meteo)."""
    event = get_event_or_404(db, event_id)
    return ApiResponse(data=await weather.get_event_weather(event))
