from typing import Optional


class TraceId:
    """
    AWS X-Ray Trace ID format:
    Root=1-timestamp-randomuuid;Parent=parentid;Sampled=sampled

    The Lambda Runtime API hands it over in the Lambda-Runtime-Trace-Id header.
    """

    def __init__(self, root: str, parent: Optional[str] = None, sampled: Optional[str] = None):
        self.root = root
        self.parent = parent
        self.sampled = sampled

    @classmethod
    def parse(cls, header: str) -> "TraceId":
        """Parse a Lambda-Runtime-Trace-Id / X-Amzn-Trace-Id header string."""
        parts = {}
        for part in header.split(";"):
            if "=" in part:
                k, v = part.split("=", 1)
                parts[k.strip()] = v.strip()

        root = parts.get("Root", "")

        # Raw ID without Root= prefix.
        if not root and header and "-" in header and "=" not in header:
            root = header.strip()

        return cls(root=root, parent=parts.get("Parent"), sampled=parts.get("Sampled"))

    def __str__(self) -> str:
        s = f"Root={self.root}"
        if self.parent:
            s += f";Parent={self.parent}"
        if self.sampled:
            s += f";Sampled={self.sampled}"
        return s
