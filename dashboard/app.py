"""Streamlit viewer for the room availability calendar API."""

from __future__ import annotations

import io
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from room_calendar.domain.models import RecordSet
from room_calendar.repository.csv_repository import CsvFormatError, CsvRecordRepository
from room_calendar.services.calendar_service import availability_frame
from room_calendar.utils.config import get_settings

# ==========================================
# Configuration & Constants
# ==========================================
API_BASE_URL = get_settings().api_base_url

st.set_page_config(
    page_title="Room Availability Calendar",
    page_icon="🏨",
    layout="wide",
)


# ==========================================
# API Helper Functions
# ==========================================
def build_payload(records: RecordSet) -> Dict[str, List[Dict[str, Any]]]:
    """Convert loaded records into the POST /availability request body."""
    return {
        "bookings": [
            {
                "guest_id": booking.masked_guest_id,
                "room_id": booking.room_id,
                "from": booking.start.isoformat(),
                "to": booking.end.isoformat(),
            }
            for booking in records.bookings
        ],
        "maintenance": [
            {
                "room_id": period.room_id,
                "from": period.start.isoformat(),
                "to": period.end.isoformat(),
            }
            for period in records.maintenance
        ],
        "linked_rooms": [
            {"suite_id": group.group_id, "room_ids": list(group.member_room_ids)}
            for group in records.linked_rooms
        ],
    }


def fetch_availability(records: RecordSet) -> Optional[Dict[str, Any]]:
    """Calls the backend availability calculation."""
    try:
        response = requests.post(
            f"{API_BASE_URL}/availability",
            json=build_payload(records),
            timeout=10,
        )
        if response.status_code == 409:
            st.error(f"Booking conflict: {response.json().get('detail')}")
            return None
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return None


def _as_text(uploaded_file: Any) -> io.StringIO:
    return io.StringIO(uploaded_file.getvalue().decode(get_settings().csv_encoding))


# ==========================================
# UI Page Functions
# ==========================================
def render_calendar_page() -> None:
    st.header("📅 Availability Calendar")
    st.markdown("Upload the three CSV exports to see free date ranges per room and suite.")

    col1, col2, col3 = st.columns(3)
    with col1:
        bookings_file = st.file_uploader("Bookings CSV", type="csv")
    with col2:
        maintenance_file = st.file_uploader("Maintenance CSV", type="csv")
    with col3:
        linked_file = st.file_uploader("Linked Rooms CSV", type="csv")

    if not (bookings_file and maintenance_file and linked_file):
        st.info("All three files are required.")
        return

    if st.button("Compute Availability", type="primary"):
        try:
            records = CsvRecordRepository().load_all(
                _as_text(bookings_file),
                _as_text(maintenance_file),
                _as_text(linked_file),
            )
        except CsvFormatError as e:
            st.error(f"Invalid CSV: {e}")
            return

        with st.spinner("Merging occupied spans..."):
            result = fetch_availability(records)

        if result:
            availability = result.get("availability", {})
            frame = availability_frame(availability)
            metric_col1, metric_col2, metric_col3 = st.columns(3)
            metric_col1.metric("Bookings", len(records.bookings))
            metric_col2.metric("Maintenance Periods", len(records.maintenance))
            metric_col3.metric("Identifiers", len(availability))

            if frame.empty:
                st.info("No availability to show.")
            else:
                st.dataframe(frame, use_container_width=True)


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("Room Availability Calendar")
    st.sidebar.markdown("---")
    st.sidebar.caption(f"API: {API_BASE_URL}")
    render_calendar_page()


if __name__ == "__main__":
    main()
