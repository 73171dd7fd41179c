from datetime import date

import pytest
from sqlalchemy import select

from agenda.core.errors import NotFoundError, ValidationError
from agenda.models.school_class import SchoolClass
from agenda.models.task import Task
from agenda.models.user import User
from agenda.schemas.classes import ClassPayload
from agenda.schemas.tasks import TaskPayload
from agenda.services import class_service, task_service


@pytest.fixture
def owners(db):
    ana = User(username='ana', email='ana@x.com', password='hash')
    ben = User(username='ben', email='ben@x.com', password='hash')
    db.add_all([ana, ben])
    db.commit()
    return ana.id, ben.id


def _calc(db, user_id: int) -> SchoolClass:
    return class_service.create_class(
        db,
        user_id,
        ClassPayload(name='Calc I', day='Monday', start_time='09:00', end_time='10:00'),
    )


def test_new_task_starts_pending(db, owners) -> None:
    ana_id, _ = owners

    task = task_service.create_task(db, ana_id, TaskPayload(title='Homework 1'))

    assert task.completed is False
    assert task.user_id == ana_id


def test_toggle_task_flips_exactly_once_per_call(db, owners) -> None:
    ana_id, _ = owners
    task = task_service.create_task(db, ana_id, TaskPayload(title='Homework 1'))

    states = [task_service.toggle_task(db, ana_id, task.id) for _ in range(3)]

    assert states == [True, False, True]
    assert db.scalar(select(Task.completed).where(Task.id == task.id)) is True


def test_toggle_task_for_non_owner_leaves_state_untouched(db, owners) -> None:
    ana_id, ben_id = owners
    task = task_service.create_task(db, ana_id, TaskPayload(title='Homework 1'))

    with pytest.raises(NotFoundError):
        task_service.toggle_task(db, ben_id, task.id)

    assert db.scalar(select(Task.completed).where(Task.id == task.id)) is False


def test_create_task_cross_checks_class_owner(db, owners) -> None:
    ana_id, ben_id = owners
    calc = _calc(db, ana_id)

    with pytest.raises(ValidationError, match='Class not found'):
        task_service.create_task(db, ben_id, TaskPayload(title='Sneaky', class_id=calc.id))


def test_update_task_cross_checks_class_owner(db, owners) -> None:
    ana_id, ben_id = owners
    calc = _calc(db, ana_id)
    task = task_service.create_task(db, ben_id, TaskPayload(title='Mine'))

    with pytest.raises(ValidationError):
        task_service.update_task(db, ben_id, task.id, TaskPayload(title='Mine', class_id=calc.id))

    assert db.scalar(select(Task.class_id).where(Task.id == task.id)) is None


def test_update_task_returns_updated_row(db, owners) -> None:
    ana_id, _ = owners
    task = task_service.create_task(db, ana_id, TaskPayload(title='Draft'))

    updated = task_service.update_task(
        db, ana_id, task.id, TaskPayload(title='Final', due_date=date(2026, 12, 1))
    )

    assert updated.id == task.id
    assert updated.title == 'Final'
    assert updated.due_date == date(2026, 12, 1)


def test_list_tasks_joins_class_name(db, owners) -> None:
    ana_id, _ = owners
    calc = _calc(db, ana_id)
    task_service.create_task(db, ana_id, TaskPayload(title='Linked', class_id=calc.id))
    task_service.create_task(db, ana_id, TaskPayload(title='Loose'))

    tasks = task_service.list_tasks(db, ana_id)

    assert {(task.title, task.class_name) for task in tasks} == {('Linked', 'Calc I'), ('Loose', None)}


def test_deleting_class_unlinks_tasks_instead_of_deleting_them(db, owners) -> None:
    ana_id, _ = owners
    calc = _calc(db, ana_id)
    calc_id = calc.id
    task_id = task_service.create_task(db, ana_id, TaskPayload(title='Homework 1', class_id=calc_id)).id

    class_service.delete_class(db, ana_id, calc_id)

    remaining = task_service.list_tasks(db, ana_id)
    assert [(item.id, item.class_id) for item in remaining] == [(task_id, None)]
    assert task_service.list_tasks(db, ana_id, class_id=calc_id) == []


def test_deleting_user_cascades_to_classes_and_tasks(db, owners) -> None:
    ana_id, _ = owners
    calc = _calc(db, ana_id)
    task_service.create_task(db, ana_id, TaskPayload(title='Homework 1', class_id=calc.id))

    db.delete(db.get(User, ana_id))
    db.commit()

    assert db.scalars(select(SchoolClass)).all() == []
    assert db.scalars(select(Task)).all() == []


def test_delete_task_is_owner_scoped(db, owners) -> None:
    ana_id, ben_id = owners
    task_id = task_service.create_task(db, ana_id, TaskPayload(title='Homework 1')).id

    with pytest.raises(NotFoundError):
        task_service.delete_task(db, ben_id, task_id)

    task_service.delete_task(db, ana_id, task_id)
    assert db.scalar(select(Task.id).where(Task.id == task_id)) is None
