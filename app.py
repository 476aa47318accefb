import logging

import gradio as gr

from data_grid_parser import config
from data_grid_parser.handlers import (
    NO_DATA_MESSAGE,
    clear_filters_handler,
    column_filter_handler,
    expand_row_handler,
    fetch_url_handler,
    filter_term_for_column,
    parse_text_handler,
    search_handler,
    sort_button_label,
    sort_handler,
    upload_file_handler,
)
from data_grid_parser.query import QueryState

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

SAMPLE_JSON = """[
  {"name": "John Doe", "age": 30, "city": "New York"},
  {"name": "Jane Smith", "age": 25, "city": "Los Angeles"},
  {"name": "Bob Johnson", "age": 35, "city": "Chicago"}
]"""

SAMPLE_XML = """<employees>
  <employee>
    <name>John Doe</name>
    <age>30</age>
    <city>New York</city>
  </employee>
  <employee>
    <name>Jane Smith</name>
    <age>25</age>
    <city>Los Angeles</city>
  </employee>
</employees>"""

# --- UI Definition ---
with gr.Blocks(title="XML/JSON Data Parser") as demo:
    gr.Markdown("# XML/JSON Data Parser")
    gr.Markdown("Parse and visualize your XML or JSON data with filtering, searching, and sorting.")

    # State
    data_state = gr.State()
    query_state = gr.State(value=QueryState())

    with gr.Tab("Paste Data"):
        text_input = gr.Textbox(
            label="Paste your XML or JSON data",
            placeholder="Paste your XML or JSON data here...",
            lines=10,
        )
        gr.Examples(examples=[[SAMPLE_JSON], [SAMPLE_XML]], inputs=[text_input], label="Try Sample Data")
        parse_btn = gr.Button("Parse Data", variant="primary")

    with gr.Tab("Upload File"):
        file_input = gr.File(label="Upload XML or JSON file", file_types=[".xml", ".json", ".txt"])

    with gr.Tab("Fetch from URL"):
        url_input = gr.Textbox(label="URL to fetch XML or JSON data", placeholder="https://api.example.com/data.json")
        fetch_btn = gr.Button("Fetch and Parse Data", variant="primary")

    status_msg = gr.Textbox(label="Status", interactive=False)

    gr.Markdown("## Data Grid")
    with gr.Row():
        search_box = gr.Textbox(label="Search", placeholder="Search across all columns...", scale=3)
        clear_btn = gr.Button("Clear All Filters", scale=1)
    with gr.Row():
        filter_column = gr.Dropdown(label="Filter column", choices=[], interactive=True)
        filter_term = gr.Textbox(label="Filter value", placeholder="Filter...")
        sort_column = gr.Dropdown(label="Sort column", choices=[], interactive=True)
        sort_btn = gr.Button("Sort ascending")
    grid_summary = gr.Markdown(NO_DATA_MESSAGE)
    grid = gr.Dataframe(label="Rows", interactive=False, wrap=True)

    gr.Markdown("## Nested Fields")
    with gr.Row():
        row_number = gr.Number(label="Row #", value=1, precision=0, minimum=1)
        nested_path = gr.Textbox(label="Nested path (optional)", placeholder="e.g. address.geo or orders.0")
        expand_btn = gr.Button("Expand Row")
    nested_view = gr.Markdown()

    load_outputs = [
        data_state,
        query_state,
        status_msg,
        grid,
        grid_summary,
        filter_column,
        sort_column,
        nested_view,
        search_box,
        filter_term,
    ]
    grid_outputs = [query_state, grid, grid_summary]

    parse_btn.click(fn=parse_text_handler, inputs=[text_input, data_state, query_state], outputs=load_outputs)
    file_input.upload(fn=upload_file_handler, inputs=[file_input, data_state, query_state], outputs=load_outputs)
    fetch_btn.click(fn=fetch_url_handler, inputs=[url_input, data_state, query_state], outputs=load_outputs)

    search_box.change(fn=search_handler, inputs=[data_state, query_state, search_box], outputs=grid_outputs)
    filter_term.change(
        fn=column_filter_handler,
        inputs=[data_state, query_state, filter_column, filter_term],
        outputs=grid_outputs,
    )
    filter_column.change(fn=filter_term_for_column, inputs=[query_state, filter_column], outputs=[filter_term])
    sort_btn.click(
        fn=sort_handler,
        inputs=[data_state, query_state, sort_column],
        outputs=grid_outputs,
    ).then(fn=sort_button_label, inputs=[query_state, sort_column], outputs=[sort_btn])
    sort_column.change(fn=sort_button_label, inputs=[query_state, sort_column], outputs=[sort_btn])
    clear_btn.click(
        fn=clear_filters_handler,
        inputs=[data_state],
        outputs=[query_state, grid, grid_summary, search_box, filter_term],
    ).then(fn=sort_button_label, inputs=[query_state, sort_column], outputs=[sort_btn])

    expand_btn.click(
        fn=expand_row_handler,
        inputs=[data_state, query_state, row_number, nested_path],
        outputs=[nested_view],
    )

if __name__ == "__main__":
    demo.launch()
