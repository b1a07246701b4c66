class FetchError(Exception):
    def __init__(self, message: str, url: str, status_code: int | None = None):
        self.message = message
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class InvalidJobError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnknownCategoryError(Exception):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown scraper category: {category}")


class JobNotFoundError(Exception):
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
