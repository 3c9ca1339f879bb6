from fastapi import APIRouter, HTTPException, Query

from healthcheck.data.doctor_loader import get_doctor, get_specialties, search_doctors

router = APIRouter()


@router.get("")
def list_doctors(
    specialty: str | None = Query(None, description="Specialty filter, e.g. Pulmonology"),
    city: str | None = Query(None, description="City filter"),
):
    """List doctors, best rated first, optionally filtered by specialty and city."""
    doctors = search_doctors(specialty=specialty, city=city)
    return {"doctors": doctors, "count": len(doctors)}


@router.get("/specialties")
def list_specialties():
    return {"specialties": get_specialties()}


@router.get("/{doctor_id}")
def doctor_detail(doctor_id: str):
    doctor = get_doctor(doctor_id)
    if doctor is None:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return doctor
