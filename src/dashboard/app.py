"""
Streamlit Dashboard Application
===============================

Landing page, prediction form, result panel and report download.
"""

import sys
from html import escape
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pandas as pd
import streamlit as st
from streamlit_option_menu import option_menu

from src.dashboard.client import PredictionClient
from src.features.encoder import FeatureEncoder
from src.features.validation import FormStatus, FormValidationError, PredictionForm
from src.reports import generate_report, report_filename
from src.utils.helpers import format_timestamp, setup_logging

# Page config
st.set_page_config(
    page_title="Churn Predictor",
    page_icon="📉",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #dc2626;
        text-align: center;
        padding: 1rem;
    }
    .sub-header {
        text-align: center;
        color: #a1a1aa;
        font-size: 1.1rem;
    }
    .feature-card {
        background-color: #18181b;
        color: #ffffff;
        padding: 1rem;
        border-radius: 0.5rem;
        min-height: 9rem;
    }
    .result-churn {
        background: linear-gradient(90deg, #991b1b, #dc2626);
        color: #ffffff;
        padding: 1rem;
        border-radius: 0.5rem;
    }
    .result-stay {
        background: linear-gradient(90deg, #166534, #16a34a);
        color: #ffffff;
        padding: 1rem;
        border-radius: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)

GENDER_LABELS = {"0": "Female", "1": "Male"}
YES_NO_LABELS = {"0": "No", "1": "Yes"}
COUNTRIES = ["France", "Germany", "Spain"]


def get_form() -> PredictionForm:
    """Form state for this browser session."""
    if "form" not in st.session_state:
        st.session_state.form = PredictionForm()
    return st.session_state.form


def field_key(field: str) -> str:
    return f"field_{field}"


def on_field_change(field: str):
    """Push a widget's new value into the form and re-validate."""
    get_form().set_value(field, st.session_state[field_key(field)])


def field_error(field: str):
    error = get_form().errors.get(field)
    if error:
        st.caption(f":red[{error}]")


def reset_form():
    """Clear the result and every widget so a new prediction starts fresh."""
    get_form().reset()
    for key in [k for k in st.session_state.keys() if str(k).startswith("field_")]:
        del st.session_state[key]


def number_field(label: str, field: str, step=1, fmt: str = "%d"):
    form = get_form()
    st.number_input(
        label,
        value=type(step)(form.values[field]),
        step=step,
        format=fmt,
        key=field_key(field),
        on_change=on_field_change,
        args=(field,),
    )
    field_error(field)


def choice_field(label: str, field: str, labels: dict):
    form = get_form()
    options = list(labels.keys())
    st.selectbox(
        label,
        options=options,
        index=options.index(form.values[field]),
        format_func=labels.get,
        key=field_key(field),
        on_change=on_field_change,
        args=(field,),
    )
    field_error(field)


def show_landing():
    st.markdown('<h1 class="main-header">Predict Customer Churn Before It Happens</h1>', unsafe_allow_html=True)
    st.markdown(
        '<p class="sub-header">Our advanced AI model helps you identify customers at risk of leaving, '
        'so you can take action before it\'s too late.</p>',
        unsafe_allow_html=True
    )

    st.markdown("---")
    st.subheader("Powerful Features")
    st.markdown("Everything you need to predict and prevent customer churn")

    cards = [
        ("Accurate Predictions",
         "Our model uses advanced machine learning algorithms to predict customer churn with high accuracy."),
        ("Detailed Reports",
         "Get comprehensive PDF reports with all the details you need to take action and retain customers."),
        ("Customer Insights",
         "Understand the key factors that contribute to customer churn and take targeted action."),
    ]
    for col, (title, text) in zip(st.columns(3), cards):
        with col:
            st.markdown(f'<div class="feature-card"><h4>{title}</h4><p>{text}</p></div>', unsafe_allow_html=True)

    st.markdown("---")
    st.subheader("How It Works")
    st.markdown("Simple process, powerful results")

    steps = [
        ("1. Enter Customer Data",
         "Input customer details including demographics, account information, and behavior patterns."),
        ("2. Get Instant Prediction",
         "Our AI model analyzes the data and provides an immediate prediction on churn probability."),
        ("3. Take Action",
         "Download detailed reports and implement targeted retention strategies for at-risk customers."),
    ]
    for col, (title, text) in zip(st.columns(3), steps):
        with col:
            st.markdown(f"#### {title}")
            st.markdown(text)

    st.markdown("---")
    st.info("Start predicting customer behavior today: open **Predict** in the sidebar.")


def show_result(form: PredictionForm):
    result = form.result
    name = escape(result.customer_name)

    if result.is_churn:
        st.markdown(
            f'<div class="result-churn"><h3>Churn Risk Detected</h3>'
            f'<h4>{name}</h4>'
            f'<p><b>This customer is likely to churn</b></p>'
            f'<p>We recommend taking immediate action to retain this customer. '
            f'Consider special offers or personalized outreach.</p></div>',
            unsafe_allow_html=True
        )
    else:
        st.markdown(
            f'<div class="result-stay"><h3>Customer Likely to Stay</h3>'
            f'<h4>{name}</h4>'
            f'<p><b>This customer is unlikely to churn</b></p>'
            f'<p>This customer shows strong loyalty indicators. Continue providing '
            f'excellent service to maintain satisfaction.</p></div>',
            unsafe_allow_html=True
        )

    st.caption(f"Prediction made on: {format_timestamp(result.timestamp)}")

    details = pd.DataFrame(FeatureEncoder().decode(result.form_data), columns=["Attribute", "Value"])
    st.dataframe(details, use_container_width=True, hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        with st.spinner("Generating..."):
            pdf_bytes = generate_report(result)
        st.download_button(
            label="Download Report",
            data=pdf_bytes,
            file_name=report_filename(result.customer_name),
            mime="application/pdf",
            use_container_width=True
        )
    with col2:
        if st.button("Predict Another", use_container_width=True):
            reset_form()
            st.rerun()


def show_predict():
    st.markdown('<h1 class="main-header">Predict Customer Churn</h1>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Enter customer details to get an instant prediction</p>', unsafe_allow_html=True)

    form = get_form()

    if form.status == FormStatus.SUCCESS and form.result is not None:
        show_result(form)
        return

    if form.status == FormStatus.FAILED and form.error:
        st.error(f"**Error** - {form.error}")

    with st.container(border=True):
        st.subheader("Customer Information")
        st.text_input(
            "Customer Name",
            value=form.values["customerName"],
            placeholder="Enter customer name",
            key=field_key("customerName"),
            on_change=on_field_change,
            args=("customerName",),
        )
        field_error("customerName")

        col1, col2 = st.columns(2)
        with col1:
            choice_field("Gender", "gender", GENDER_LABELS)
        with col2:
            number_field("Age", "age")

        st.radio(
            "Geography",
            options=COUNTRIES,
            index=COUNTRIES.index(form.values["geography"]),
            horizontal=True,
            key=field_key("geography"),
            on_change=on_field_change,
            args=("geography",),
        )
        field_error("geography")

    with st.container(border=True):
        st.subheader("Financial Information")
        col1, col2 = st.columns(2)
        with col1:
            number_field("Credit Score", "creditScore")
            st.caption("Score between 300-900")
            number_field("Balance", "balance", step=0.01, fmt="%.2f")
        with col2:
            number_field("Estimated Salary", "estimatedSalary", step=0.01, fmt="%.2f")
            choice_field("Has Credit Card", "hasCrCard", YES_NO_LABELS)

    with st.container(border=True):
        st.subheader("Account Information")
        col1, col2 = st.columns(2)
        with col1:
            number_field("Tenure (years)", "tenure")
        with col2:
            number_field("Number of Products", "numOfProducts")
        choice_field("Is Active Member", "isActiveMember", YES_NO_LABELS)

    label = "Get Prediction" if form.is_valid else "Complete All Fields"
    if st.button(label, disabled=not form.can_submit, type="primary", use_container_width=True):
        with st.spinner("Processing..."):
            try:
                form.submit(st.session_state.client.predict)
            except FormValidationError:
                # start_submit refreshed form.errors; they render on rerun
                pass
        st.rerun()


@st.cache_resource
def configure_logging():
    """Install the loguru sinks once per dashboard process."""
    setup_logging()


configure_logging()

if "client" not in st.session_state:
    st.session_state.client = PredictionClient()

# Sidebar Navigation
with st.sidebar:
    st.markdown("## Churn Predictor")

    selected = option_menu(
        menu_title=None,
        options=["Home", "Predict"],
        icons=["house", "person-check"],
        menu_icon="cast",
        default_index=0,
    )

    st.markdown("---")
    st.markdown("### About")
    st.markdown("""
    **Churn Predictor**

    Identify bank customers at risk
    of leaving and download a
    report with next steps.

    Built with:
    - FastAPI
    - Streamlit
    - ReportLab
    """)


if selected == "Home":
    show_landing()
elif selected == "Predict":
    show_predict()


# Run with: streamlit run src/dashboard/app.py
