from dataclasses import dataclass, asdict, fields as dc_fields

# Canonical field order: grid columns, paste offsets and sheet columns all follow it.
FIELDS = [
    "book_id",
    "book_name",
    "author",
    "publisher",
    "isbn",
    "price",
    "paper_date",
    "ebook_date",
    "request_date",
]

DATE_FIELDS = ("paper_date", "ebook_date", "request_date")

LABELS = {
    "book_id": "도서 ID",
    "book_name": "도서명",
    "author": "저자명",
    "publisher": "출판사명",
    "isbn": "ISBN",
    "price": "정가",
    "paper_date": "종이책 출간일",
    "ebook_date": "전자책 출간일",
    "request_date": "요청일자",
    "submitted_at": "제출일시",
}

@dataclass(frozen=True)
class Row:
    id: int = 0
    book_id: str = ""
    book_name: str = ""
    author: str = ""
    publisher: str = ""
    isbn: str = ""
    price: str = ""
    paper_date: str = ""
    ebook_date: str = ""
    request_date: str = ""

    def values(self) -> list[str]:
        return [getattr(self, f) for f in FIELDS]

    def to_row(self) -> dict:
        return asdict(self)

@dataclass(frozen=True)
class Submission:
    book_id: str = ""
    book_name: str = ""
    author: str = ""
    publisher: str = ""
    isbn: str = ""
    price: str = ""
    paper_date: str = ""
    ebook_date: str = ""
    request_date: str = ""
    submitted_at: str = ""  # stamped at append time, read-only

    @classmethod
    def headers(cls) -> list[str]:
        return [f.name for f in dc_fields(cls)]

    @classmethod
    def from_values(cls, values: list) -> "Submission":
        """Map a sheet row positionally; missing trailing cells become ""."""
        names = cls.headers()
        padded = [str(v) if v is not None else "" for v in values[:len(names)]]
        padded += [""] * (len(names) - len(padded))
        return cls(**dict(zip(names, padded)))

    def to_row(self) -> dict:
        return asdict(self)
