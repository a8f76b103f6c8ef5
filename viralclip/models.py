from dataclasses import dataclass, field


@dataclass(frozen=True)
class Caption:
    """One timed caption line; times are seconds from the start of the clip."""

    start_time: float
    end_time: float
    text: str

    @classmethod
    def from_dict(cls, data: dict) -> "Caption":
        return cls(
            start_time=float(data["startTime"]),
            end_time=float(data["endTime"]),
            text=data["text"],
        )

    def to_dict(self) -> dict:
        return {"startTime": self.start_time, "endTime": self.end_time, "text": self.text}


@dataclass(frozen=True)
class Clip:
    """A clip proposed by the model. start_time/end_time are "MM:SS" strings."""

    title: str
    start_time: str
    end_time: str
    summary: str
    virality_score: float
    captions: tuple[Caption, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "Clip":
        return cls(
            title=data["title"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            summary=data["summary"],
            virality_score=float(data["viralityScore"]),
            captions=tuple(Caption.from_dict(item) for item in data["captions"]),
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "summary": self.summary,
            "viralityScore": self.virality_score,
            "captions": [caption.to_dict() for caption in self.captions],
        }
