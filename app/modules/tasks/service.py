from supabase import Client
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse, TASK_STATUS_FILTERS
from app.core.query import now_iso, first_row
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _check_exists(self, table: str, record_id: Optional[str], label: str):
        if not record_id:
            return
        result = self.supabase.table(table)\
            .select("id")\
            .eq("id", record_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail=f"{label} not found")

    def create_task(self, task_data: TaskCreate) -> TaskResponse:
        """Create a new task for a salesperson"""
        title = task_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Salesperson and title are required")
        try:
            self._check_exists("salespeople", task_data.salesperson_id, "Salesperson")
            self._check_exists("leads", task_data.lead_id, "Lead")

            result = self.supabase.table("tasks").insert({
                "salesperson_id": task_data.salesperson_id,
                "lead_id": task_data.lead_id or None,
                "title": title,
                "description": task_data.description or None,
                "due_date": task_data.due_date.isoformat() if task_data.due_date else None,
                "priority": task_data.priority,
                "completed": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create task")

            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_task_by_id(self, task_id: str) -> TaskResponse:
        """Get task by ID"""
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("id", task_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Task not found")

            return TaskResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_tasks(self, status: str = "all", salesperson_id: Optional[str] = None,
                   limit: int = 200, offset: int = 0) -> List[TaskResponse]:
        """List tasks by due date"""
        if status not in TASK_STATUS_FILTERS:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status filter '{status}'. Allowed: {', '.join(TASK_STATUS_FILTERS)}"
            )
        try:
            query = self.supabase.table("tasks").select("*")
            if status == "pending":
                query = query.eq("completed", False)
            elif status == "completed":
                query = query.eq("completed", True)
            if salesperson_id and salesperson_id != "all":
                query = query.eq("salesperson_id", salesperson_id)

            result = query.order("due_date")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [TaskResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_task(self, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        """Update task"""
        try:
            update_data = task_data.model_dump(exclude_unset=True)
            if "title" in update_data and not (update_data["title"] or "").strip():
                raise HTTPException(status_code=400, detail="Task title cannot be empty")
            if "salesperson_id" in update_data:
                if not update_data["salesperson_id"]:
                    raise HTTPException(status_code=400, detail="Task must be assigned to a salesperson")
                self._check_exists("salespeople", update_data["salesperson_id"], "Salesperson")
            if update_data.get("lead_id"):
                self._check_exists("leads", update_data["lead_id"], "Lead")
            if update_data.get("due_date"):
                update_data["due_date"] = update_data["due_date"].isoformat()

            if not update_data:
                return self.get_task_by_id(task_id)

            update_data["updated_at"] = now_iso()
            result = self.supabase.table("tasks")\
                .update(update_data)\
                .eq("id", task_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_completed(self, task_id: str) -> TaskResponse:
        """Flip a task between pending and completed"""
        current = self.get_task_by_id(task_id)
        try:
            result = self.supabase.table("tasks")\
                .update({"completed": not current.completed, "updated_at": now_iso()})\
                .eq("id", task_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_task(self, task_id: str) -> bool:
        """Delete task"""
        try:
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
