"""App factory smoke tests."""

from cottage_booking.main import create_app


def test_app_exposes_every_operation():
    app = create_app()
    paths = {route.path for route in app.routes}

    assert {
        "/v1/getAllCottages",
        "/v1/getAvailablePackages",
        "/v1/getPackageById",
        "/v1/checkCottageAvailability",
        "/v1/calculateBookingCost",
        "/v1/createBooking",
        "/v1/getBookingDetails",
        "/v1/updateBookingStatus",
        "/v1/createSafariBookings",
        "/v1/updateSafariStatus",
        "/v1/createSafariInquiry",
        "/v1/listSafariInquiries",
        "/v1/updateSafariInquiryStatus",
        "/health",
        "/ready",
        "/info",
        "/metrics",
    } <= paths


def test_app_title():
    assert create_app().title == "Cottage Reservations API"
