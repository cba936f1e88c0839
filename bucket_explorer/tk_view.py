from __future__ import annotations
"""Tkinter-based UI for the bucket explorer application."""
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from .models import BucketListing, ObjectEntry, SortDirection
from .parser import ListingParseError
from .presenter import BucketExplorerPresenter
from .ui_utils import (
    describe_owner,
    format_last_modified,
    format_size,
    storage_class_label,
    summarize_listing,
)

OBJECT_COLUMNS = (
    ("type", "Type", 70),
    ("size", "Size", 90),
    ("last_modified", "Last Modified", 170),
    ("storage_class", "Storage Class", 110),
    ("checksum", "Checksum", 90),
    ("etag", "ETag", 220),
    ("owner", "Owner", 140),
)
SORT_LABELS = {
    SortDirection.ASCENDING: "Date ↑ (oldest first)",
    SortDirection.DESCENDING: "Date ↓ (newest first)",
}


class BucketExplorerApp:
    """Tkinter view that delegates business logic to :class:`BucketExplorerPresenter`."""

    def __init__(self, root: tk.Tk, presenter: BucketExplorerPresenter | None = None, url: str = ""):
        self.root = root
        self.root.title("S3 Bucket Explorer")
        self.root.geometry("1100x720")
        self.root.minsize(720, 480)

        self.presenter = presenter or BucketExplorerPresenter(
            dispatch=lambda func: self.root.after(0, func)
        )
        self._operation_in_progress = False
        self._about_window: tk.Toplevel | None = None
        self.url_var = tk.StringVar(value=url or self.presenter.initial_url())
        self.search_var = tk.StringVar()
        self.sort_label_var = tk.StringVar(value=SORT_LABELS[self.presenter.sort_direction])
        self.summary_vars = {
            name: tk.StringVar(value="-")
            for name in ("bucket", "prefix", "max_keys", "truncated", "objects", "size")
        }

        self._create_menu()
        self._create_widgets()
        self.search_var.trace_add("write", lambda *_: self._apply_search())

    def _create_menu(self) -> None:
        menubar = tk.Menu(self.root)

        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Listing File...", command=self.open_listing_file)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.destroy)
        menubar.add_cascade(label="File", menu=file_menu)

        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="About", command=self.show_about_dialog)
        menubar.add_cascade(label="Help", menu=help_menu)

        self.root.config(menu=menubar)

    def _create_widgets(self) -> None:
        main_frame = ttk.Frame(self.root, padding="10")
        main_frame.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(3, weight=1)

        url_frame = ttk.Frame(main_frame)
        url_frame.grid(row=0, column=0, sticky=(tk.W, tk.E))
        url_frame.columnconfigure(1, weight=1)

        ttk.Label(url_frame, text="Listing URL:").grid(row=0, column=0, sticky=tk.W, pady=2)
        url_entry = ttk.Entry(url_frame, textvariable=self.url_var)
        url_entry.grid(row=0, column=1, sticky=(tk.W, tk.E), pady=2, padx=(5, 5))
        url_entry.bind("<Return>", lambda _: self.fetch_listing())
        self.fetch_button = ttk.Button(url_frame, text="Fetch", command=self.fetch_listing)
        self.fetch_button.grid(row=0, column=2, pady=2)

        summary_frame = ttk.LabelFrame(main_frame, text="Bucket", padding="5")
        summary_frame.grid(row=1, column=0, sticky=(tk.W, tk.E), pady=(10, 0))
        labels = (
            ("bucket", "Name:"),
            ("prefix", "Prefix:"),
            ("max_keys", "Max Keys:"),
            ("truncated", "Truncated:"),
            ("objects", "Objects:"),
            ("size", "Total Size:"),
        )
        for index, (name, text) in enumerate(labels):
            row, column = divmod(index, 3)
            ttk.Label(summary_frame, text=text).grid(row=row, column=column * 2, sticky=tk.W, padx=(0, 5))
            ttk.Label(summary_frame, textvariable=self.summary_vars[name]).grid(
                row=row, column=column * 2 + 1, sticky=tk.W, padx=(0, 20)
            )

        filter_frame = ttk.Frame(main_frame)
        filter_frame.grid(row=2, column=0, sticky=(tk.W, tk.E), pady=(10, 0))
        filter_frame.columnconfigure(1, weight=1)
        ttk.Label(filter_frame, text="Search:").grid(row=0, column=0, sticky=tk.W)
        ttk.Entry(filter_frame, textvariable=self.search_var).grid(
            row=0, column=1, sticky=(tk.W, tk.E), padx=(5, 5)
        )
        ttk.Button(filter_frame, textvariable=self.sort_label_var, command=self.toggle_sort).grid(
            row=0, column=2
        )

        tree_frame = ttk.Frame(main_frame)
        tree_frame.grid(row=3, column=0, sticky=(tk.W, tk.E, tk.N, tk.S), pady=(10, 0))
        tree_frame.columnconfigure(0, weight=1)
        tree_frame.rowconfigure(0, weight=1)

        self.objects_tree = ttk.Treeview(
            tree_frame,
            columns=[name for name, _, _ in OBJECT_COLUMNS],
            selectmode="browse",
        )
        self.objects_tree.heading("#0", text="Key", anchor=tk.W)
        self.objects_tree.column("#0", width=320, stretch=True)
        for name, heading, width in OBJECT_COLUMNS:
            self.objects_tree.heading(name, text=heading, anchor=tk.W)
            self.objects_tree.column(name, width=width, stretch=False)
        self.objects_tree.heading("last_modified", command=self.toggle_sort)
        self.objects_tree.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        tree_scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self.objects_tree.yview)
        tree_scroll_y.grid(row=0, column=1, sticky=(tk.N, tk.S))
        tree_scroll_x = ttk.Scrollbar(tree_frame, orient="horizontal", command=self.objects_tree.xview)
        tree_scroll_x.grid(row=1, column=0, sticky=(tk.W, tk.E))
        self.objects_tree.configure(yscrollcommand=tree_scroll_y.set, xscrollcommand=tree_scroll_x.set)

        self.progress = ttk.Progressbar(main_frame, mode="indeterminate")
        self.progress.grid(row=4, column=0, sticky=(tk.W, tk.E), pady=5)

        self.status_var = tk.StringVar(value="Enter a bucket listing URL to begin")
        self.status_label = ttk.Label(main_frame, textvariable=self.status_var, anchor=tk.W)
        self.status_label.grid(row=5, column=0, sticky=(tk.W, tk.E))

    def fetch_listing(self) -> None:
        if self._operation_in_progress:
            return
        url = self.url_var.get().strip()
        if not url:
            messagebox.showerror("Error", "Please enter a listing URL")
            return

        self._start_operation()
        self.status_var.set(f"Fetching {url}...")
        self.presenter.fetch_listing(
            url=url,
            on_success=self._handle_listing_loaded,
            on_error=lambda message: self._show_error("Listing Error", message),
            on_done=self._end_operation,
        )

    def open_listing_file(self) -> None:
        path = filedialog.askopenfilename(
            title="Open Listing File",
            filetypes=(("XML files", "*.xml"), ("All files", "*.*")),
        )
        if not path:
            return
        try:
            with open(path, "rb") as handle:
                listing = self.presenter.load_text(handle.read())
        except OSError as exc:
            self._show_error("File Error", f"Error reading {path}: {exc}")
            return
        except ListingParseError as exc:
            self._show_error("Listing Error", str(exc))
            return
        self._handle_listing_loaded(listing)

    def toggle_sort(self) -> None:
        direction = self.presenter.toggle_sort_direction()
        self.sort_label_var.set(SORT_LABELS[direction])
        self._render_objects()

    def _apply_search(self) -> None:
        self.presenter.set_search_text(self.search_var.get())
        self._render_objects()

    def _handle_listing_loaded(self, listing: BucketListing) -> None:
        self.summary_vars["bucket"].set(listing.bucket_name)
        self.summary_vars["prefix"].set(listing.prefix or "-")
        self.summary_vars["max_keys"].set(listing.max_keys or "-")
        self.summary_vars["truncated"].set("Yes" if listing.is_truncated else "No")
        self.summary_vars["objects"].set(str(listing.total_count))
        self.summary_vars["size"].set(format_size(listing.total_size_bytes))
        self._render_objects()

    def _render_objects(self) -> None:
        self._clear_tree()
        listing = self.presenter.listing
        if listing is None:
            return
        objects = self.presenter.visible_objects()
        for entry in objects:
            self._insert_object_row(entry)
        self.status_var.set(summarize_listing(listing, len(objects)))

    def _insert_object_row(self, entry: ObjectEntry) -> None:
        self.objects_tree.insert(
            "",
            "end",
            text=entry.key,
            values=(
                entry.extension,
                format_size(entry.size_bytes),
                format_last_modified(entry.last_modified),
                storage_class_label(entry.storage_class),
                entry.checksum_algorithm or "-",
                entry.etag or "-",
                describe_owner(entry.owner),
            ),
        )

    def _clear_tree(self) -> None:
        children = self.objects_tree.get_children()
        if children:
            self.objects_tree.delete(*children)

    def _start_operation(self) -> None:
        self._operation_in_progress = True
        self.fetch_button.configure(state="disabled")
        self.progress.start()

    def _end_operation(self) -> None:
        self._operation_in_progress = False
        self.progress.stop()
        self.fetch_button.configure(state="normal")

    def show_about_dialog(self) -> None:
        if self._about_window is not None and self._about_window.winfo_exists():
            self._about_window.lift()
            return
        info = self.presenter.package_info
        window = tk.Toplevel(self.root)
        window.title("About")
        window.resizable(False, False)
        window.transient(self.root)
        frame = ttk.Frame(window, padding="15")
        frame.grid(row=0, column=0)
        title = f"{info.name} {info.version}".strip()
        ttk.Label(frame, text=title, font=("TkDefaultFont", 12, "bold")).grid(row=0, column=0, sticky=tk.W)
        ttk.Label(frame, text=info.summary, wraplength=320).grid(row=1, column=0, sticky=tk.W, pady=(5, 0))
        row = 2
        for label, value in (("Homepage", info.homepage), ("Repository", info.repository), ("Author", info.author)):
            if value:
                ttk.Label(frame, text=f"{label}: {value}").grid(row=row, column=0, sticky=tk.W)
                row += 1
        ttk.Button(frame, text="Close", command=self._close_about_window).grid(row=row, column=0, pady=(10, 0))
        window.protocol("WM_DELETE_WINDOW", self._close_about_window)
        self._about_window = window

    def _close_about_window(self) -> None:
        if self._about_window is not None:
            self._about_window.destroy()
        self._about_window = None

    def _show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message)
        self.status_var.set(message)
