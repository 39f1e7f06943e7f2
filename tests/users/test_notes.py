"""
Tests for care notes and the patient notifications they trigger.
"""
from src.notes.models import Note


def _add_note(client, auth_header, token, patient_id, title="Checkup", description="All good"):
    return client.post(
        "/api/users/note",
        json={"title": title, "description": description, "patientId": patient_id},
        headers=auth_header(token)
    )


def test_full_care_flow(client, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor(email="a@x.com", password="Str0ng!Pass")
    assert doctor["token"]
    assert doctor["isDoctor"] is True
    patient = signup_patient(email="p@x.com", password="Str0ng!Pass")
    assert patient["isPatient"] is True

    subscribed = client.patch(
        f"/api/users/subscribe/{doctor['userId']}",
        headers=auth_header(patient["token"])
    ).json()["updatedPatient"]
    assert subscribed["doctors"] == [doctor["userId"]]
    doctor_view = client.get(
        f"/api/users/doctor/{doctor['userId']}",
        headers=auth_header(patient["token"])
    ).json()["doctor"]
    assert doctor_view["patients"] == [patient["userId"]]

    response = _add_note(client, auth_header, doctor["token"], patient["userId"])
    assert response.status_code == 200
    note = response.json()["note"]
    assert note["title"] == "Checkup"
    assert note["patientId"] == patient["userId"]
    assert note["doctorId"] == doctor["userId"]
    assert sent_emails == [{"to": "p@x.com", "subject": "Note is Added", "body": "A new note is added"}]

    patient_notes = client.get(
        f"/api/users/notes/{patient['userId']}",
        headers=auth_header(patient["token"])
    ).json()["notes"]
    assert [n["id"] for n in patient_notes] == [note["id"]]

    other = signup_doctor(email="b@x.com", username="Dr B")
    other_note = _add_note(client, auth_header, other["token"], patient["userId"], title="Second opinion").json()["note"]

    doctor_notes = client.get(
        f"/api/users/notes/{patient['userId']}",
        headers=auth_header(doctor["token"])
    ).json()["notes"]
    assert [n["id"] for n in doctor_notes] == [note["id"]]

    patient_notes = client.get(
        f"/api/users/notes/{patient['userId']}",
        headers=auth_header(patient["token"])
    ).json()["notes"]
    assert [n["id"] for n in patient_notes] == [note["id"], other_note["id"]]


def test_add_note_missing_field(client, db, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor()
    patient = signup_patient()

    response = client.post(
        "/api/users/note",
        json={"title": "Checkup", "patientId": patient["userId"]},
        headers=auth_header(doctor["token"])
    )

    assert response.status_code == 400
    assert response.json() == {"error": "All fields must be filled."}
    assert db.query(Note).count() == 0
    assert sent_emails == []


def test_note_author_is_always_the_caller(client, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor()
    other = signup_doctor(email="b@x.com", username="Dr B")
    patient = signup_patient()

    response = client.post(
        "/api/users/note",
        json={
            "title": "Checkup",
            "description": "All good",
            "patientId": patient["userId"],
            "doctorId": other["userId"]
        },
        headers=auth_header(doctor["token"])
    )

    assert response.json()["note"]["doctorId"] == doctor["userId"]


def test_patient_reads_notes_by_patient_id(client, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor()
    first = signup_patient(email="p@x.com")
    second = signup_patient(email="q@x.com", username="P2")
    note = _add_note(client, auth_header, doctor["token"], first["userId"]).json()["note"]

    response = client.get(f"/api/users/notes/{first['userId']}", headers=auth_header(second["token"]))

    assert response.status_code == 200
    assert [n["id"] for n in response.json()["notes"]] == [note["id"]]


def test_notes_for_patient_without_notes(client, signup_patient, auth_header):
    patient = signup_patient()

    response = client.get(f"/api/users/notes/{patient['userId']}", headers=auth_header(patient["token"]))

    assert response.status_code == 200
    assert response.json() == {"notes": []}


def test_edit_note(client, db, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor()
    patient = signup_patient()
    note = _add_note(client, auth_header, doctor["token"], patient["userId"]).json()["note"]

    response = client.patch(
        f"/api/users/note/edit/{note['id']}",
        json={"description": "Needs follow-up"},
        headers=auth_header(doctor["token"])
    )

    assert response.status_code == 200
    edited = response.json()["note"]
    assert edited["title"] == "Checkup"
    assert edited["description"] == "Needs follow-up"
    assert db.get(Note, note["id"]).description == "Needs follow-up"
    assert [mail["subject"] for mail in sent_emails] == ["Note is Added", "Note is Edited"]


def test_edit_unknown_note(client, signup_doctor, auth_header, sent_emails):
    doctor = signup_doctor()

    response = client.patch(
        "/api/users/note/edit/999",
        json={"title": "Nothing"},
        headers=auth_header(doctor["token"])
    )

    assert response.status_code == 200
    assert response.json() == {"note": None}
    assert sent_emails == []


def test_delete_note(client, db, signup_doctor, signup_patient, auth_header, sent_emails):
    doctor = signup_doctor()
    patient = signup_patient()
    note = _add_note(client, auth_header, doctor["token"], patient["userId"]).json()["note"]

    response = client.delete(f"/api/users/note/delete/{note['id']}", headers=auth_header(doctor["token"]))

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted."}
    assert db.get(Note, note["id"]) is None
    assert sent_emails[-1]["subject"] == "Note is Deleted"
    assert sent_emails[-1]["to"] == "p@x.com"


def test_delete_unknown_note(client, signup_doctor, auth_header, sent_emails):
    doctor = signup_doctor()

    response = client.delete("/api/users/note/delete/999", headers=auth_header(doctor["token"]))

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted."}
    assert sent_emails == []


def test_note_for_unknown_patient_skips_notification(client, signup_doctor, auth_header, sent_emails):
    doctor = signup_doctor()

    response = _add_note(client, auth_header, doctor["token"], 999)

    assert response.status_code == 200
    assert response.json()["note"]["patientId"] == 999
    assert sent_emails == []


def test_failed_notification_does_not_affect_note(client, db, signup_doctor, signup_patient, auth_header, monkeypatch):
    from src.core import notifications

    def failing_send(to_email, subject, body):
        return False

    monkeypatch.setattr(notifications, "send_note_notification", failing_send)
    doctor = signup_doctor()
    patient = signup_patient()

    response = _add_note(client, auth_header, doctor["token"], patient["userId"])

    assert response.status_code == 200
    assert db.query(Note).count() == 1


def test_unconfigured_mail_is_skipped():
    from src.core.notifications import send_note_notification, validate_email_config

    assert validate_email_config() is False
    assert send_note_notification("p@x.com", "Note is Added", "A new note is added") is False
