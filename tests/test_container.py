from concurrent.futures import ThreadPoolExecutor

import pytest

from class_presence.container import wire


class Empty:
    def get_by_id(self, class_id):
        return None

    def get_for_institution(self, institution_id):
        return None

    def get_for_class_and_student(self, class_id, student_id):
        return None


def test_wire_shares_one_location_executor():
    pool = ThreadPoolExecutor(max_workers=2)
    container = wire(classes_repo=Empty(), policies_repo=Empty(), attendance_repo=Empty(), executor=pool)

    assert container.location_executor is pool


def test_close_shuts_the_location_executor_down():
    container = wire(classes_repo=Empty(), policies_repo=Empty(), attendance_repo=Empty(), location_workers=3)
    assert container.location_executor.submit(lambda: "ok").result() == "ok"

    container.close()

    with pytest.raises(RuntimeError):
        container.location_executor.submit(lambda: "late")
